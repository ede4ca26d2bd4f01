"""HTTP front end for spendlog."""
