"""Console front end for spendlog."""
