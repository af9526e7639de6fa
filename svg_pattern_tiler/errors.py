"""
Exceptions raised by the tiling pipeline.
"""


class TilingError(Exception):
	"""
	Base class for every failure of a conversion.
	"""


class ValidationError(TilingError, ValueError):
	"""
	Input rejected before any layout work.
	"""


class LayoutError(TilingError):
	"""
	Paper and margin leave no usable area.
	"""


class RenderError(TilingError):
	"""
	The renderer failed for a tile.
	"""


class ConversionCancelled(TilingError):
	"""
	The caller asked to stop between tiles.
	"""
