"""Core contracts: exceptions, result type, algorithm descriptors, protocols."""
