#!/usr/bin/env python3
from postsite.cli import main

if __name__ == "__main__":
    main()
