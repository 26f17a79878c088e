"""Gitea (target) client."""
