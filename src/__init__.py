"""Page Object Compiler."""
