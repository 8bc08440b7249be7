#!/usr/bin/env python3
"""
dom-login - Human-paced login automation
Convenient entry point script in project root.
"""

import sys
import os

# Add project root to Python path
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

from dom_login.cli import main

if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        print("\n⚠️  Login interrupted by user")
        sys.exit(1)
