"""
`python -m hoopfinder` runs the same CLI as the `hoopfinder` console script.
"""

from hoopfinder.cli import main

main()
