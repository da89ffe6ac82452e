"""Runtime services shared by every subsystem."""
