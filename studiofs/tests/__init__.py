"""studiofs test suite."""
