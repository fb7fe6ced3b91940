"""User interface layers for :mod:`pkgmanifest`."""
