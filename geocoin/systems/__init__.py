"""World generation systems: luck oracle and cache generator."""
