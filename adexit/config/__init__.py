"""Exit config model, validation and loading."""
