"""Sharing one node: ``sin(x) * sin(x)`` computes the sine once per change of x."""

import lazygraph as lg

with lg.use_graph():
    x = lg.create_input("x")
    s = lg.sin(x)
    square = s * s

if __name__ == "__main__":
    for value in (0.0, 0.5, 1.0):
        x.set(value)
        print(f"sin({value})^2 = {square.compute()}")
