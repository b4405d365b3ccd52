from .events import (Action, DeployAttack, DeployRepair, ExecuteAttack,
                     ExecuteRepair, NetworkEvent, Notify)
from .heap import BinaryHeap, EmptyQueue, PriorityContainer
from .intrusion import (Config, EndCondition, InvalidConfiguration,
                        Simulator)
from .pqueue import PriorityQueue
