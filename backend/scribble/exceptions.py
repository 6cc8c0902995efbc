"""
Game exceptions.

Every error the core raises derives from ScribbleError and carries a short
``code`` that the transport layer sends back to clients verbatim.
"""


class ScribbleError(Exception):
    """Base class for all game errors."""
    code = "error"


# ============ Room ============

class RoomNotFound(ScribbleError):
    """Room does not exist."""
    code = "room_not_found"

    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"Room {room_id} not found")


class RoomAlreadyExists(ScribbleError):
    """A room with this id was already created."""
    code = "room_exists"

    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"Room ID {room_id} already exists")


# ============ Round ============

class RoundNotFound(ScribbleError):
    """Room has no current round."""
    code = "round_not_found"

    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"Room {room_id} has no active round")


class NoDrawingAvailable(ScribbleError):
    """Current round has no drawing to guess from yet."""
    code = "no_drawing"

    def __init__(self, room_id):
        self.room_id = room_id
        super().__init__(f"No drawing image available in room {room_id}")


# ============ AI gateway ============

class AIServiceError(ScribbleError):
    """Drawing or guessing call to the AI gateway failed."""
    code = "ai_failed"
