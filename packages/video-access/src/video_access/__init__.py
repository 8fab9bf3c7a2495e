"""FastAPI service issuing CloudFront signed cookies and URLs to enrolled users."""
