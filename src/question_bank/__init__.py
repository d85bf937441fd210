"""Question bank and career catalog models and loaders."""
