"""Provider-neutral helpers used while mapping raw plans."""
