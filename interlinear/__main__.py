"""Package entry point for ``python -m interlinear``.

WHY: Users run the glosser as ``python -m interlinear examples.txt``.
Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it.

HOW: Delegates to the CLI's main() function.
"""

from interlinear.cli import main

if __name__ == "__main__":
    main()
