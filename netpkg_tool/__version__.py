"""Version information for netpkg-tool package"""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)
__author__ = "phil-harmoniq"
__license__ = "MIT"
__copyright__ = "Copyright (c) 2017"
