"""diffreview — browse git changes as unified or side-by-side diffs."""

__version__ = "0.1.0"
