"""Repository discovery, filtering, target resolution and mirroring."""
