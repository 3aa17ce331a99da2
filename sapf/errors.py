class SapfError(Exception):
    """ Base class for all sapf tooling errors"""
    pass

class SapfGenerationError(SapfError):
    """ Raised when the function catalog cannot be regenerated from the sapf binary"""

class SapfReplError(SapfError):
    """ Raised when the REPL process cannot be started or written to"""
