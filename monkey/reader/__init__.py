"""Reader: tokens, lexer and Pratt parser for Monkey source text."""
