"""Retentive neuroevolution networks.

Evolvable recurrent networks whose topology (neuron count, link set) and
parameters (weights, biases, retention) change through stochastic mutation
rather than gradient descent.
"""

from beartype import BeartypeConf
from beartype.claw import beartype_this_package

beartype_this_package(conf=BeartypeConf(is_pep484_tower=True))
