"""Import classes used to describe symbolic facts and the operations acting on them."""

from .fact import Binding as Binding
from .fact import Fact as Fact
from .fact import FactValue as FactValue
from .fact import Param as Param
from .operation import ConditionType as ConditionType
from .operation import EffectType as EffectType
from .operation import Operation as Operation
