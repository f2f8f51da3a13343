from arena.replay_buffer import ReplayBuffer


def record_game(buffer, reward, length):
    for turn in range(length):
        buffer.record_sample(f"board{turn}", [1.0], turn % 2 == 0, turn)
    buffer.record_terminal(reward, length)


def test_value_labeling():
    # White wins: good for white to move, bad for black to move
    buffer = ReplayBuffer(capacity=100)
    record_game(buffer, 1.0, 3)
    assert [value for _, _, value, _ in list(buffer.buffer)] == [1.0, -1.0, 1.0]

    # Black wins
    buffer = ReplayBuffer(capacity=100)
    record_game(buffer, -1.0, 4)
    assert [value for _, _, value, _ in list(buffer.buffer)] == [-1.0, 1.0, -1.0, 1.0]

    # Draw -> always 0
    buffer = ReplayBuffer(capacity=100)
    record_game(buffer, 0.0, 2)
    assert [value for _, _, value, _ in list(buffer.buffer)] == [0.0, 0.0]


def test_samples_are_committed_once_per_game():
    buffer = ReplayBuffer(capacity=100)
    buffer.record_sample("board0", [1.0], True, 0)
    assert len(buffer) == 0

    buffer.record_terminal(1.0, 1)
    record_game(buffer, -1.0, 2)
    assert buffer.num_games == 2
    assert [board for board, _, _, _ in list(buffer.buffer)] == ["board0", "board0", "board1"]
    assert [t for _, _, _, t in list(buffer.buffer)] == [1, 2, 1]


def test_capacity_and_sampling():
    buffer = ReplayBuffer(capacity=5)
    record_game(buffer, 1.0, 4)
    record_game(buffer, 1.0, 4)
    assert len(buffer) == 5
    assert len(buffer.sample_batch(3)) == 3
    assert len(buffer.sample_batch(10)) == 5
