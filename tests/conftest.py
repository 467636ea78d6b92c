import matplotlib

# Plots are written to files only; never open a window during tests
matplotlib.use("Agg")
