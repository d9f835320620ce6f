"""Studio commands: single, multi, thumbnail, broll and paragraphs."""
