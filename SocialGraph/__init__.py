"""In-memory social graph service: accounts, posts, follows and feeds."""
