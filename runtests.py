#!/usr/bin/env python
import sys

import pytest


def main():
    return pytest.main(["tests"])


if __name__ == "__main__":
    sys.exit(main())
