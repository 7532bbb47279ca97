"""Git adapters: commit history in, staged paths out."""

from .log import CommitSource, GitCommitSource, StaticCommitSource, load_commits_file
from .stager import GitStager

__all__ = [
    "CommitSource",
    "GitCommitSource",
    "GitStager",
    "StaticCommitSource",
    "load_commits_file",
]
