"""Ring validation for polygon boundaries.

- ring: simple-ring checks (intersections, backtracking, winding) and
  straight-run vertex repair
"""
