"""regdelta command line front end."""
