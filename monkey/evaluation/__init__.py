"""Tree-walking evaluation of Monkey programs."""
