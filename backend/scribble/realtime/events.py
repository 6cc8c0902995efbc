# Outbound Socket.IO event names.
ROOM_PLAYERS = "room:players"
ROOM_SCOREBOARD = "room:scoreboard"
ROOM_JOINED = "room:joined"
ROOM_ERROR = "room:error"
ROUND_STARTED = "round:started"
ROUND_INSTRUCTION = "round:instruction"
ROUND_DRAWING = "round:drawing"
ROUND_ENDED = "round:ended"
ROUND_ERROR = "round:error"
GUESS_NEW = "guess:new"
GAME_TICK = "game:tick"
GAME_RESET = "game:reset"
AI_GUESS = "ai:guess"

CORRECT_GUESS_MARKER = "Guessed the word!"

END_REASONS = {
    "time_up": "Time is up!",
    "all_guessed": "Everyone guessed the word!",
    "abandoned": "Round abandoned",
}
