from solprobe.version import VERSION

__version__ = VERSION
