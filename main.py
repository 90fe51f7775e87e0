"""
Entry point for Content Intel.
Delegates to content_intel.main.
"""
import sys
import os

# Add the current directory to python path
sys.path.append(os.getcwd())

from content_intel.main import main

if __name__ == "__main__":
    sys.exit(main())
