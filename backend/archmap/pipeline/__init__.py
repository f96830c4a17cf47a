# Extraction -> resolution -> synthesis -> validation -> rendering
