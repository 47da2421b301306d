"""Team activity board: deadline reminder scheduling and dispatch."""
