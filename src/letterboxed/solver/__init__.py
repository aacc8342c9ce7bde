"""Search for Letter Boxed solutions."""
