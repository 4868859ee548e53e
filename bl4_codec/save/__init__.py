# Save container: encryption envelope, YAML document, item state flags
