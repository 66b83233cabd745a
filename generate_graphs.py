import matplotlib.pyplot as plt
from matplotlib.patches import Patch

from config import POLICIES
from memory_manager import MemoryManager

FREE_COLOR = '#d9d9d9'


def owner_colors(report):
    # One colour per process, in order of first appearance in memory
    cmap = plt.get_cmap('tab10')
    colors = {}
    for owner in report.owners:
        if owner is not None and owner[0] not in colors:
            colors[owner[0]] = cmap(len(colors) % cmap.N)
    return colors


def draw_frame_map(ax, report, title=None):
    colors = owner_colors(report)
    columns = max(1, min(16, report.num_frames))

    for frame_num, owner in enumerate(report.owners):
        row, col = divmod(frame_num, columns)
        color = FREE_COLOR if owner is None else colors[owner[0]]
        ax.add_patch(plt.Rectangle((col, -row - 1), 1, 1, facecolor=color, edgecolor='black'))
        label = str(frame_num) if owner is None else f"{frame_num}\nP{owner[0]}:{owner[1]}"
        ax.text(col + 0.5, -row - 0.5, label, ha='center', va='center', fontsize=7)

    rows = max(1, -(-report.num_frames // columns))
    ax.set_xlim(0, columns)
    ax.set_ylim(-rows, 0)
    ax.set_aspect('equal')
    ax.axis('off')
    ax.set_title(title or f"Free memory: {report.free_percentage:.2f}%")

    handles = [Patch(facecolor=FREE_COLOR, edgecolor='black', label='free')]
    handles += [Patch(facecolor=color, edgecolor='black', label=f"process {pid}")
                for pid, color in colors.items()]
    ax.legend(handles=handles, loc='upper center', bbox_to_anchor=(0.5, 0), ncol=min(len(handles), 4),
              fontsize=8, frameon=False)
    return ax


def plot_frame_map(report, filename):
    fig, ax = plt.subplots(figsize=(8, 3 + report.num_frames // 16))
    draw_frame_map(ax, report)
    fig.savefig(filename, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return filename


def run_scenario(policy, seed=0):
    manager = MemoryManager(policy=policy, seed=seed)
    manager.initialize(4096, 256, 2048)
    manager.create_process(1, 700)
    manager.create_process(2, 1500)
    manager.create_process(3, 300)
    manager.destroy_process(2)
    manager.create_process(4, 1000)
    return manager.display_memory()


def main():
    print("Running placement scenario...")
    reports = {policy: run_scenario(policy) for policy in POLICIES}

    fig, axes = plt.subplots(1, len(POLICIES), figsize=(15, 4))
    fig.suptitle('Frame Placement by Selection Policy', fontsize=14, fontweight='bold')
    for ax, policy in zip(axes, POLICIES):
        report = reports[policy]
        draw_frame_map(ax, report, title=f"{policy} ({report.free_percentage:.2f}% free)")

    plt.tight_layout()
    plt.savefig('frame_map_comparison.png', dpi=300, bbox_inches='tight')
    print("\nGraph saved as 'frame_map_comparison.png'")
    plt.show()


if __name__ == '__main__':
    main()
