"""
Runtime composition of class-like modules.

  declaration ─▶ classify ─▶ embed ─▶ register ─▶ constructor ─▶ instance

| Stage                 | Module         | Responsibility                               |
<---------------------- + -------------- + --------------------------------------------->
| **Structural copy**   | ``copier``     | deep copies that reject ancestor cycles      |
| **Classification**    | ``classifier`` | state / behaviors / protocol hooks           |
| **Embedding**         | ``embedding``  | fold embedded modules, last listed wins      |
| **Registry**          | ``registry``   | one record per fully-qualified name          |
| **Loading**           | ``loader``     | import a package to resolve a missing name   |
| **Instances**         | ``factory``    | dispatch tables, instance types, constructor |
| **Membership**        | ``membership`` | ``instanceof`` over the embedding closure    |
| **Declaration API**   | ``declaration`` | ``declare`` / ``new`` / sealed declarations |
| **Analysis**          | ``analysis``   | networkx graph, DOT export, descriptions     |
"""

from . import copier as _copier
from . import names as _names
from . import classifier as _classifier
from . import registry as _registry
from . import loader as _loader
from . import embedding as _embedding
from . import factory as _factory
from . import membership as _membership
from . import declaration as _declaration
from . import analysis as _analysis
from .cli import main, parse_args

from .copier import *
from .names import *
from .classifier import *
from .registry import *
from .loader import *
from .embedding import *
from .factory import *
from .membership import *
from .declaration import *
from .analysis import *

__all__ = []
for module in (
    _copier,
    _names,
    _classifier,
    _registry,
    _loader,
    _embedding,
    _factory,
    _membership,
    _declaration,
    _analysis,
):
    __all__.extend(getattr(module, '__all__', []))
__all__ += ['main', 'parse_args']
__all__ = list(dict.fromkeys(__all__))
