"""GEO three-layer network mapping: prompts, contents and AI citation platforms."""
