"""Host adapters: the system clipboard and the Textual front end."""
