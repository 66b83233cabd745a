import matplotlib

# Charts are only ever written to files during tests
matplotlib.use('Agg')
