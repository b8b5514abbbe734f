from importlib.metadata import PackageNotFoundError, version

try:
    version = version("SeekLine")
except PackageNotFoundError:
    version = "0.0.0"
