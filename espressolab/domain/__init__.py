"""Domain vocabulary: the schema registry and record predicates."""
