"""Release validation gate: the runner plus its registered checks."""
