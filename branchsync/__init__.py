"""branch-sync - create and merge a pull request between two Bitbucket branches."""

__version__ = "0.1.0"
