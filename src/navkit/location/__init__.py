"""Location — snapshots, the location/router protocols, and an in-memory location."""
