# Post image enrichment: describe uploaded images, embed them, index them in Qdrant
