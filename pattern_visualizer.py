import matplotlib.pyplot as plt

from weave_permute.patterns.registry import PRESETS


def draw_gather_mapping(size: int, permutation_func, pattern_name, label_columns: bool = True, arrow_cuts: float = 0.15):
    """Draw source columns (top row) and the destination column each one lands in (bottom row)."""
    perm = permutation_func(size)

    fig, ax = plt.subplots(figsize=(size, 3))

    # source row at y=2, destination row at y=0
    for row_y in (0, 2):
        for j in range(size + 1):
            ax.plot([j, j], [row_y, row_y + 1], linewidth=1, color='black')
        ax.plot([0, size], [row_y, row_y], linewidth=1, color='black')
        ax.plot([0, size], [row_y + 1, row_y + 1], linewidth=1, color='black')

    for dest, src in enumerate(perm):
        start_x = src + 0.5
        end_x = dest + 0.5
        start_y = 2 - arrow_cuts
        end_y = 1 + arrow_cuts
        ax.arrow(
            start_x, start_y,
            end_x - start_x, end_y - start_y,
            head_width=0.15,
            length_includes_head=True,
            fc='red',
            ec='red'
        )

    if label_columns:
        for j in range(size):
            ax.text(j + 0.5, 2.5, str(j + 1), ha='center', va='center')
            ax.text(j + 0.5, 0.5, str(int(perm[j]) + 1), ha='center', va='center')

    ax.set_aspect('equal')
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_xlim(0, size)
    ax.set_ylim(0, 3)
    ax.set_title(pattern_name)

    plt.show()


RENAMED_PATTERNS = {
    "Identity": PRESETS.get("identity"),
    "Reverse": PRESETS.get("reverse"),
    "Interleave": PRESETS.get("interleave"),
    "Pair Swap": PRESETS.get("pair_swap"),
    "Center Out": PRESETS.get("center_out"),
    "Rotate": PRESETS.get("rotate"),
}


if __name__ == "__main__":
    for pattern_name, permutation_func in RENAMED_PATTERNS.items():
        draw_gather_mapping(size=8, permutation_func=permutation_func, pattern_name=pattern_name)
