"""sourceref command line interface."""
