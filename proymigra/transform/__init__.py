# proymigra/transform/__init__.py
