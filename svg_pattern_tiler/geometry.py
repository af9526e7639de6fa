"""
Small 2D affine transform for placing rotated marks on a page.

Page coordinates are millimeters with y growing downward, so a positive
angle turns counter-clockwise as seen on paper.
"""

# Standard Library
import dataclasses
import math


@dataclasses.dataclass(frozen=True)
class Affine2D:
	# maps (x, y) to (a*x + c*y + e, b*x + d*y + f)
	a: float = 1.0
	b: float = 0.0
	c: float = 0.0
	d: float = 1.0
	e: float = 0.0
	f: float = 0.0

	@classmethod
	def translation(cls, dx: float, dy: float) -> "Affine2D":
		return cls(e=dx, f=dy)

	@classmethod
	def rotation(cls, degrees: float, about: tuple[float, float] = (0.0, 0.0)) -> "Affine2D":
		"""
		Rotate about a point, counter-clockwise on paper.

		Args:
			degrees: Angle in degrees.
			about: Pivot point.

		Returns:
			Affine2D.
		"""
		radians = math.radians(degrees)
		cos_value = math.cos(radians)
		sin_value = math.sin(radians)
		# y points down, so the sine terms swap sign against the usual matrix
		turn = cls(a=cos_value, b=-sin_value, c=sin_value, d=cos_value)
		pivot_x, pivot_y = about
		return (
			cls.translation(-pivot_x, -pivot_y)
			.then(turn)
			.then(cls.translation(pivot_x, pivot_y))
		)

	def then(self, other: "Affine2D") -> "Affine2D":
		"""
		Compose so that self is applied first, then other.
		"""
		return Affine2D(
			a=other.a * self.a + other.c * self.b,
			b=other.b * self.a + other.d * self.b,
			c=other.a * self.c + other.c * self.d,
			d=other.b * self.c + other.d * self.d,
			e=other.a * self.e + other.c * self.f + other.e,
			f=other.b * self.e + other.d * self.f + other.f,
		)

	def apply(self, point: tuple[float, float]) -> tuple[float, float]:
		x, y = point
		return (self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)

	def apply_all(self, points: list[tuple[float, float]]) -> list[tuple[float, float]]:
		return [self.apply(point) for point in points]
