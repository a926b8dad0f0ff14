"""Release-tag decision: catalog, classification, computation and apply."""
