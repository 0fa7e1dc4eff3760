"""Entity model, backend contract and errors shared by all writers."""
