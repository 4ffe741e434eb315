"""Core building blocks shared by all classifiers."""
