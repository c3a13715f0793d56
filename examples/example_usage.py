import numpy as np

from symbolic_differentiation import Expression, sin, configure_logging, LogLevel


def main():
  configure_logging(LogLevel.MINIMAL)

  # Build a tree with operators, or parse it from text
  x = Expression("x")
  built = x * sin(x) + 2 ** x
  parsed = Expression.parse("x*sin(x) + 2^x")
  print(f"Built:  {built}")
  print(f"Parsed: {parsed}")
  print(f"Same tree: {built == parsed}")

  # Evaluate at a point and over a grid
  print(f"f(1.5) = {parsed.evaluate({'x': 1.5}):.6f}")
  grid = np.linspace(0.0, np.pi, 5)
  print(f"f(grid) = {parsed.evaluate({'x': grid})}")

  # Differentiate; the result is left unsimplified
  derivative = parsed.differentiate("x")
  print(f"f'(x) = {derivative}")
  print(f"f'(x) as LaTeX = {derivative.to_latex()}")
  print(f"f'(1.5) = {derivative.evaluate({'x': 1.5}):.6f}")

  # Substitute a variable with a constant
  surface = Expression.parse("x^2 + x*y")
  slice_y2 = surface.substitute("y", 2.0)
  print(f"{surface} with y=2: {slice_y2}")


if __name__ == "__main__":
  main()
