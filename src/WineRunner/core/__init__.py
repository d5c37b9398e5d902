"""Core domain types: WINEDEBUG rules and prefix command assembly."""
