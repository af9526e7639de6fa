"""
Pytest configuration for local imports and shared fakes.
"""

# Standard Library
import contextlib
import os
import sys

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()
import svg_pattern_tiler.config
import svg_pattern_tiler.errors


#============================================
def build_a4_paper(margin: float = 10.0) -> svg_pattern_tiler.config.PaperSpec:
	"""
	Build an A4 portrait PaperSpec for tests.
	"""
	return svg_pattern_tiler.config.PaperSpec(paper_width=210.0, paper_height=297.0, margin=margin)


#============================================
def square_svg(size_mm: float) -> str:
	"""
	Build an SVG declared in mm with a matching viewBox.
	"""
	return (
		f'<svg xmlns="http://www.w3.org/2000/svg" width="{size_mm}mm" height="{size_mm}mm" '
		f'viewBox="0 0 {size_mm} {size_mm}"></svg>'
	)


class RecordingWriter:
	"""
	Document writer fake that records every drawing call.
	"""

	def __init__(self, page_width: float, page_height: float) -> None:
		self.calls: list[tuple] = [("create", page_width, page_height)]
		self.pages = 1
		self.content: list[tuple[int, bytes, object]] = []

	def __getattr__(self, name: str):
		if name.startswith("_"):
			raise AttributeError(name)

		def record(*args, **kwargs):
			self.calls.append((name, *args, kwargs))

		return record

	def add_page(self, page_width: float, page_height: float) -> None:
		self.pages += 1
		self.calls.append(("add_page", page_width, page_height))

	def text(self, x: float, y: float, value: str, align: str = "left", rotation: float = 0.0) -> None:
		self.calls.append(("text", x, y, value, align, rotation))

	def text_width(self, value: str) -> float:
		return 10.0

	@contextlib.contextmanager
	def saved_state(self):
		self.calls.append(("save_state",))
		yield
		self.calls.append(("restore_state",))

	def place_content(self, pdf_bytes: bytes, box) -> None:
		self.content.append((self.pages - 1, pdf_bytes, box))

	def save(self) -> bytes:
		self.calls.append(("save",))
		return b"%PDF-fake"

	def texts(self) -> list[str]:
		return [call[3] for call in self.calls if call[0] == "text"]

	def calls_named(self, name: str) -> list[tuple]:
		return [call for call in self.calls if call[0] == name]


class FakeRenderer:
	"""
	Renderer fake that records the requested regions.
	"""

	def __init__(self, fail_on_call: int | None = None) -> None:
		self.requests: list[tuple] = []
		self.fail_on_call = fail_on_call

	def render(self, document, region, writer, box) -> None:
		self.requests.append((region, box))
		if self.fail_on_call is not None and len(self.requests) == self.fail_on_call:
			raise svg_pattern_tiler.errors.RenderError("renderer rejected the tile")
		writer.place_content(b"tile", box)
