"""Knowledge Card Chat: password-gated chat grounded in curated knowledge cards."""
