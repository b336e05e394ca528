"""Blog data provider: field-selective views over blog posts, tags,
categories and authors."""
