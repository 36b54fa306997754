"""Back office API: admin authentication, user management and blog content."""
