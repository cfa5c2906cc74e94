"""Framework foundation: errors, core tool types, registry, config, codec."""
