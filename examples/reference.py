"""The expression ``x1 + x2 * sin(x2 + x3 ** x4)``.

Evaluate it from the command line:

    lazygraph calc examples/reference.py -i examples/reference_inputs.toml
"""

import lazygraph as lg

graph = lg.Graph()

x1 = graph.create_input("x1")
x2 = graph.create_input("x2")
x3 = graph.create_input("x3")
x4 = graph.create_input("x4")

# x2 is shared: it feeds both the product and the inner sum
expr = lg.add(x1, lg.mul(x2, lg.sin(lg.add(x2, lg.pow(x3, x4)))))
