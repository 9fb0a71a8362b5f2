"""Runtime object model and lexical environments."""
