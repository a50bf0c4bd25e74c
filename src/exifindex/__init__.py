# ABOUTME: Exifindex - builds the gallery JSON index from embedded image metadata.
# ABOUTME: Package root; subpackages hold the decoder, resolver, pipeline, and CLI.
