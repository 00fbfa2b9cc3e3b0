"""Reserved words that custom short codes may not use."""

# Path segments and operational names that would shadow routes or confuse users.
RESERVED_CODES = frozenset({
    "admin", "api", "www", "ftp", "mail", "email", "support", "help",
    "about", "contact", "terms", "privacy", "legal", "blog", "news",
    "docs", "documentation", "download", "downloads", "upload", "uploads",
    "static", "assets", "css", "js", "img", "images", "favicon",
    "robots", "sitemap", "feed", "rss", "atom", "xml", "json",
    "login", "logout", "signin", "signup", "register", "auth",
    "dashboard", "profile", "account", "settings", "config",
    "test", "testing", "dev", "development", "staging", "prod", "production",
    "qr", "shorten", "short", "url", "link", "redirect",
})
