"""wst command line interface."""
