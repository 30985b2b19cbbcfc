"""Installation orchestration for patchkit."""
