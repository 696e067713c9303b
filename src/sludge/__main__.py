#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""python -m sludge"""

from sludge.cli import main

if __name__ == "__main__":
    main()
