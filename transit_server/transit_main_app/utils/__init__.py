"""Utils package - helper functions and utilities"""

# Note: segment/expansion/grouping modules are not imported here to avoid circular imports with models
from .constants import *
