# proymigra/analysis/__init__.py
