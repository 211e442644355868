"""Team domain interfaces."""
