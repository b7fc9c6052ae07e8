"""Static data, RSS feed, sitemap and robots.txt generation for the investment blog."""
