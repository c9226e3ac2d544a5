"""Version information for mshkit."""

__version__ = "0.1.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version components
VERSION_MAJOR = __version_info__[0]
VERSION_MINOR = __version_info__[1]
VERSION_PATCH = __version_info__[2]

# Legacy MSH format written by the encoder
MSH_FORMAT_VERSION = "2.2"
