"""Task store, repository, query and statistics core."""
