"""Native functions available to every Monkey program."""
