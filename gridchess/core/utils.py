def format_info(label, depth, score, nodes, elapsed, move):
    """One-line summary of an engine decision, for debug logs."""
    move_str = move.uci() if move else "-"
    nps = int(nodes / elapsed) if elapsed > 0 else 0
    return (f"info {label} depth {depth} score {score} nodes {nodes} nps {nps} "
            f"time {int(elapsed * 1000)} move {move_str}")
