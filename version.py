__version__ = "0.3.0"
__timestamp__ = None
