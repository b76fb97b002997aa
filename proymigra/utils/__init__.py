# proymigra/utils/__init__.py
