"""HTTP front end for the simulator."""
