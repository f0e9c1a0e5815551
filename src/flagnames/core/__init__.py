"""Core resolver, flag registry and parser glue for flagnames."""
