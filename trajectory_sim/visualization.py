"""
Visualization Engine
====================
Plots for trajectory analysis:
  1. Side view (height vs horizontal distance)
  2. Top view (crossrange drift)
  3. 3D flight path
  4. Launch mode comparison
  5. Dashboard with key metrics and chart series
  6. Animated trajectory (saved as GIF)

World axes are x downrange, y up, z crossrange. 3D plots map world y to
the matplotlib vertical axis.
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import matplotlib.gridspec as gridspec
from typing import Dict, Optional
import os

from .analytics import chart_series, playback_frames
from .integrator import SimulationResult


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'accent_colors': ['#00d4ff', '#ff6b35', '#00e676', '#ffeb3b',
                      '#e040fb', '#ff5252'],
    'font_family': 'monospace',
}

MODE_COLORS = {
    'GUN': '#ff5252',
    'CANNON': '#ff6b35',
    'KICK': '#00e676',
    'THROW': '#00d4ff',
}


def _apply_dark_style(fig, axes):
    """Apply consistent dark theme to figure and axes."""
    fig.patch.set_facecolor(STYLE['bg_color'])
    if not isinstance(axes, np.ndarray):
        axes = [axes]
    else:
        axes = axes.flatten()

    for ax in axes:
        ax.set_facecolor(STYLE['bg_color'])
        ax.tick_params(colors=STYLE['text_color'])
        ax.xaxis.label.set_color(STYLE['text_color'])
        ax.yaxis.label.set_color(STYLE['text_color'])
        ax.title.set_color(STYLE['text_color'])
        ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
        for spine in ax.spines.values():
            spine.set_color(STYLE['grid_color'])


def _legend(ax, **kwargs):
    ax.legend(facecolor='#1a1a1a', edgecolor='#444',
              labelcolor=STYLE['text_color'], **kwargs)


def _save(fig, save_path):
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])


def ensure_output_dir(path: str = 'outputs'):
    os.makedirs(path, exist_ok=True)
    return path


# ══════════════════════════════════════════════════════════════════════════
#  1. Side View
# ══════════════════════════════════════════════════════════════════════════

def plot_trajectory(result: SimulationResult, save_path: str = None,
                    title: str = None, show: bool = False) -> plt.Figure:
    """Height vs horizontal distance for a single trajectory."""
    fig, ax = plt.subplots(figsize=(12, 6))
    _apply_dark_style(fig, ax)

    dist = result.horizontal_distance
    ax.plot(dist, result.y, color=STYLE['accent_colors'][0], linewidth=2.5,
            label='Trajectory')

    ax.plot(dist[0], result.y[0], 'o', color='#00e676', markersize=10,
            label='Launch', zorder=5)
    ax.plot(dist[-1], result.y[-1], 'x', color='#ff5252', markersize=12,
            markeredgewidth=3, label='Impact', zorder=5)

    # apex among the in-flight samples (impact sample excluded)
    idx_max = int(np.argmax(result.y[:-1])) if len(result.path) > 1 else 0
    ax.plot(dist[idx_max], result.y[idx_max], '^', color='#ffeb3b',
            markersize=10, label='Apex', zorder=5)

    p = result.params
    if title is None:
        title = (f'Projectile Trajectory (v₀={p.initial_velocity:.0f} m/s, '
                 f'θ={p.launch_angle:.0f}°)')
    ax.set_xlabel('Horizontal distance (m)', fontsize=12)
    ax.set_ylabel('Height (m)', fontsize=12)
    ax.set_title(title, fontsize=13, fontweight='bold')
    _legend(ax, loc='upper right', fontsize=10)
    ax.set_ylim(bottom=0)
    ax.set_xlim(left=0)

    plt.tight_layout()
    _save(fig, save_path)
    if show:
        plt.show()
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  2. Top View
# ══════════════════════════════════════════════════════════════════════════

def plot_top_view(results: Dict[str, SimulationResult],
                  save_path: str = None) -> plt.Figure:
    """Downrange vs crossrange for one or more labelled trajectories."""
    fig, ax = plt.subplots(figsize=(12, 5))
    _apply_dark_style(fig, ax)

    colors = STYLE['accent_colors']
    for i, (label, res) in enumerate(results.items()):
        ax.plot(res.x, res.z, color=colors[i % len(colors)], linewidth=2,
                label=f'{label}  (drift {res.impact_state.position.z:+.2f} m)')
    ax.axhline(y=0, color='#555', linestyle='--', alpha=0.5)

    ax.set_xlabel('Downrange x (m)')
    ax.set_ylabel('Crossrange z (m)')
    ax.set_title('Top View — Lateral Drift', fontweight='bold')
    _legend(ax, fontsize=9)

    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  3. 3D Flight Path
# ══════════════════════════════════════════════════════════════════════════

def _style_3d(ax):
    ax.set_facecolor(STYLE['bg_color'])
    for axis in (ax.xaxis, ax.yaxis, ax.zaxis):
        axis.label.set_color(STYLE['text_color'])
        axis.set_pane_color((0.05, 0.05, 0.05, 1.0))
    ax.tick_params(colors=STYLE['text_color'])
    ax.set_xlabel('x (m)')
    ax.set_ylabel('z (m)')
    ax.set_zlabel('height (m)')


def plot_path_3d(result: SimulationResult, save_path: str = None) -> plt.Figure:
    """Static 3D polyline of all positions."""
    fig = plt.figure(figsize=(11, 8))
    fig.patch.set_facecolor(STYLE['bg_color'])
    ax = fig.add_subplot(projection='3d')
    _style_3d(ax)

    ax.plot(result.x, result.z, result.y, color='#00d4ff', linewidth=2)
    ax.scatter([result.x[0]], [result.z[0]], [result.y[0]],
               color='#00e676', s=40)
    ax.scatter([result.x[-1]], [result.z[-1]], [result.y[-1]],
               color='#ff5252', marker='x', s=60)
    ax.set_title('3D Flight Path', color=STYLE['text_color'],
                 fontweight='bold')

    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  4. Launch Mode Comparison
# ══════════════════════════════════════════════════════════════════════════

def plot_mode_comparison(results: Dict[str, SimulationResult],
                         save_path: str = None) -> plt.Figure:
    """Side views and range bars for several launch modes."""
    fig, axes = plt.subplots(1, 2, figsize=(16, 6))
    _apply_dark_style(fig, axes)

    ax = axes[0]
    for name, res in results.items():
        color = MODE_COLORS.get(str(name).upper(), '#ffffff')
        ax.plot(res.horizontal_distance, res.y, color=color, linewidth=2,
                label=str(name))
    ax.set_xscale('symlog', linthresh=10.0)
    ax.set_xlabel('Horizontal distance (m, symlog)')
    ax.set_ylabel('Height (m)')
    ax.set_title('Trajectory Comparison', fontweight='bold')
    _legend(ax, fontsize=9)
    ax.set_ylim(bottom=0)

    ax = axes[1]
    names = [str(n) for n in results]
    ranges = [results[n].max_range for n in results]
    colors = [MODE_COLORS.get(n.upper(), '#888') for n in names]
    bars = ax.barh(names, ranges, color=colors, alpha=0.85, edgecolor='#555')
    ax.set_xlabel('Range (m)')
    ax.set_title('Range Comparison', fontweight='bold')
    for bar, r in zip(bars, ranges):
        ax.text(bar.get_width(), bar.get_y() + bar.get_height() / 2,
                f' {r:.1f} m', va='center', color=STYLE['text_color'],
                fontsize=10)

    fig.suptitle('Launch Modes — Default Parameters',
                 fontsize=15, fontweight='bold', color=STYLE['text_color'], y=1.02)
    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  5. Dashboard
# ══════════════════════════════════════════════════════════════════════════

def plot_dashboard(result: SimulationResult, title: str = 'PROJECTILE',
                   save_path: str = None) -> plt.Figure:
    """Trajectory, metrics panel and the decimated chart series."""
    fig = plt.figure(figsize=(18, 11))
    fig.patch.set_facecolor(STYLE['bg_color'])
    gs = gridspec.GridSpec(3, 3, figure=fig, hspace=0.35, wspace=0.3)

    # ── 3D path (top, spans 2 cols) ──
    ax1 = fig.add_subplot(gs[0:2, :2], projection='3d')
    _style_3d(ax1)
    ax1.plot(result.x, result.z, result.y, color='#00d4ff', linewidth=2.5)
    ax1.set_title('TRAJECTORY', fontweight='bold', color=STYLE['text_color'],
                  fontsize=13)

    # ── Metrics panel (top-right) ──
    ax_info = fig.add_subplot(gs[0, 2])
    ax_info.set_facecolor('#111111')
    ax_info.axis('off')

    p = result.params
    metrics = [
        ('LAUNCH', f'{p.initial_velocity:.0f} m/s @ {p.launch_angle:.0f}°'),
        ('AZIMUTH', f'{p.launch_azimuth:.0f}°'),
        ('RANGE', f'{result.max_range:.2f} m'),
        ('MAX HEIGHT', f'{result.max_height:.2f} m'),
        ('FLIGHT TIME', f'{result.time_of_flight:.2f} s'),
        ('IMPACT VEL', f'{result.impact_velocity:.1f} m/s'),
        ('DRIFT', f'{result.impact_state.position.z:+.2f} m'),
        ('METHOD', f'RK4  dt={result.dt}'),
    ]
    for i, (label, value) in enumerate(metrics):
        y_pos = 0.92 - i * 0.115
        ax_info.text(0.05, y_pos, label, fontsize=10, fontweight='bold',
                     color='#888888', transform=ax_info.transAxes,
                     fontfamily='monospace')
        ax_info.text(0.95, y_pos, value, fontsize=11, fontweight='bold',
                     color='#00d4ff', transform=ax_info.transAxes,
                     ha='right', fontfamily='monospace')
    ax_info.set_title('FLIGHT DATA', fontweight='bold',
                      color=STYLE['text_color'], fontsize=13, pad=10)

    series = chart_series(result)

    # ── Height vs distance (middle-right) ──
    ax2 = fig.add_subplot(gs[1, 2])
    _apply_dark_style(fig, ax2)
    ax2.fill_between(series['distance'], series['height'], alpha=0.2,
                     color='#3b82f6')
    ax2.plot(series['distance'], series['height'], color='#3b82f6', linewidth=2)
    ax2.set_xlabel('Distance (m)')
    ax2.set_ylabel('Height (m)')
    ax2.set_title('HEIGHT vs DISTANCE', fontweight='bold')

    # ── Speed vs time (bottom-left) ──
    ax3 = fig.add_subplot(gs[2, 0])
    _apply_dark_style(fig, ax3)
    ax3.plot(result.time, result.speed, color='#ff6b35', linewidth=2)
    ax3.set_xlabel('Time (s)')
    ax3.set_ylabel('Speed (m/s)')
    ax3.set_title('SPEED', fontweight='bold')

    # ── Height & distance vs time (bottom-center) ──
    ax4 = fig.add_subplot(gs[2, 1])
    _apply_dark_style(fig, ax4)
    ax4.plot(series['time'], series['height'], color='#ffeb3b', linewidth=2,
             label='height')
    ax4.plot(series['time'], series['distance'], color='#00e676', linewidth=2,
             label='distance')
    ax4.set_xlabel('Time (s)')
    ax4.set_ylabel('m')
    ax4.set_title('HEIGHT / DISTANCE', fontweight='bold')
    _legend(ax4, fontsize=8)

    # ── Velocity components (bottom-right) ──
    ax5 = fig.add_subplot(gs[2, 2])
    _apply_dark_style(fig, ax5)
    ax5.plot(result.time, result.vx, label='vx', color='#00d4ff', linewidth=1.5)
    ax5.plot(result.time, result.vy, label='vy', color='#ff6b35', linewidth=1.5)
    if np.max(np.abs(result.vz)) > 0.1:
        ax5.plot(result.time, result.vz, label='vz', color='#00e676',
                 linewidth=1.5)
    ax5.set_xlabel('Time (s)')
    ax5.set_ylabel('Velocity (m/s)')
    ax5.set_title('VELOCITY COMPONENTS', fontweight='bold')
    _legend(ax5, fontsize=8)

    fig.suptitle(f'{title} FLIGHT DASHBOARD', fontsize=16, fontweight='bold',
                 color='#00d4ff', y=0.98)
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  6. Animated Trajectory (GIF)
# ══════════════════════════════════════════════════════════════════════════

def create_trajectory_animation(result: SimulationResult,
                                save_path: str = 'outputs/trajectory_anim.gif',
                                fps: int = 20,
                                max_frames: Optional[int] = 150) -> str:
    """
    Animated GIF of a point moving along the static flight polyline.

    Frames follow the simulation clock: one GIF second per simulated
    second, capped at max_frames by slowing the clock down.
    """
    from matplotlib.animation import FuncAnimation, PillowWriter

    rate = float(fps)
    if max_frames and result.time_of_flight * rate > max_frames:
        rate = max_frames / result.time_of_flight
    times, positions = playback_frames(result, fps=rate)

    fig = plt.figure(figsize=(11, 7))
    fig.patch.set_facecolor(STYLE['bg_color'])
    ax = fig.add_subplot(projection='3d')
    _style_3d(ax)

    ax.plot(result.x, result.z, result.y, color='#00d4ff', linewidth=1.0,
            alpha=0.35)
    trail, = ax.plot([], [], [], color='#00d4ff', linewidth=2)
    point, = ax.plot([], [], [], 'o', color='#ffeb3b', markersize=7)
    label = ax.text2D(0.02, 0.95, '', transform=ax.transAxes,
                      color=STYLE['text_color'], fontsize=11,
                      fontfamily='monospace')
    ax.set_title('Trajectory Playback', color=STYLE['text_color'],
                 fontweight='bold')

    def animate(i):
        x, y, z = positions[:i + 1, 0], positions[:i + 1, 1], positions[:i + 1, 2]
        trail.set_data(x, z)
        trail.set_3d_properties(y)
        point.set_data([x[-1]], [z[-1]])
        point.set_3d_properties([y[-1]])
        label.set_text(f't={times[i]:5.2f}s | h={y[-1]:7.2f} m | '
                       f'd={np.hypot(x[-1], z[-1]):7.2f} m')
        return trail, point, label

    anim = FuncAnimation(fig, animate, frames=len(times), interval=1000 / fps,
                         blit=False)
    anim.save(save_path, writer=PillowWriter(fps=fps),
              savefig_kwargs={'facecolor': STYLE['bg_color']})
    plt.close(fig)
    return save_path
