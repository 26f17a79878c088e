"""Mirror GitHub repositories and issues to Gitea."""
