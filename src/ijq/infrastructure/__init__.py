"""Infrastructure: the jq subprocess, the history file and in-memory caches."""
