from enum import Enum, auto


class ClientState(Enum):
    INIT = auto()
    CONNECTING = auto()
    IDLE = auto()          # welcomed, not searching
    SEARCHING = auto()
    PAIRED = auto()
    DISCONNECTED = auto()
    SESSION_DESTROYED = auto()


class StateMachine:
    def __init__(self):
        self.current_state = ClientState.INIT

    def transition_to(self, new_state: ClientState):
        self.current_state = new_state

    def is_in(self, *states) -> bool:
        return self.current_state in states
