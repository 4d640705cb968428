# -*- coding: utf-8 -*-

"""
Main entry point for the plugin configuration command line.
"""

import sys

from plugin_boilerplate.cli import main

if __name__ == "__main__":
    sys.exit(main())
