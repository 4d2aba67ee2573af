"""Google sign-in, signed viewer cookies and request authorization."""
