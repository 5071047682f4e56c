"""Application services shared by use cases."""
