"""Layout composition: groups, ports, tiling, vias and strap routing."""
