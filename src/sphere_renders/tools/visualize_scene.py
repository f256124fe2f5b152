import os
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from sphere_renders import constants
from sphere_renders.core import Renderer, camera_rays
from sphere_renders.rendering import directions_to_light
from sphere_renders.intersections import sphere_normals


class DebugRenderer(Renderer):
    def get_light_counts(self, ray_origin, ray_directions):
        # Number of lights each primary hit can see; -1 for misses
        hits = self.hit_selector.select_primary(ray_origin, ray_directions)
        counts = np.full(hits.distance.shape[0], -1)

        hit_mask = hits.hit_mask
        if not np.any(hit_mask):
            return counts

        idx = hits.sphere_index[hit_mask]
        points = hits.hit_point[hit_mask]
        normals = sphere_normals(points, self.scene.centers[idx])

        visible = np.zeros(points.shape[0], dtype=int)
        for light in self.scene.lights:
            light_dirs = directions_to_light(points, light)
            visible += self.shadow_model.light_visibility(points, normals, idx, light, light_dirs)

        counts[hit_mask] = visible
        return counts

    def render_light_counts(self, width, height, fov):
        flat_dirs = camera_rays(width, height, fov)
        counts = self.get_light_counts(self.camera_origin, flat_dirs)
        return counts.reshape(height, width)


def plot_top_down(ax, scene, fov=constants.DEFAULT_FOV_DEGREES,
                  aspect_ratio=constants.DEFAULT_WIDTH / constants.DEFAULT_HEIGHT):
    """Draw spheres, lights and the horizontal camera frustum on the X/Z plane."""
    ax.set_title("Scene (top down, X/Z)")
    ax.set_aspect('equal')
    ax.set_xlabel("x")
    ax.set_ylabel("z")

    for sphere in scene.spheres:
        cx, _, cz = sphere.center
        ax.add_patch(plt.Circle((cx, cz), sphere.radius, color=sphere.color, alpha=0.8))

    for light in scene.lights:
        lx, _, lz = light.position
        ax.plot(lx, lz, marker='*', color='gold', markeredgecolor='black', markersize=12)

    # Far extent of the frustum: just past the farthest object
    depths = [abs(s.center[2]) + s.radius for s in scene.spheres]
    depths += [abs(light.position[2]) for light in scene.lights]
    far = 1.1 * max(depths) if depths else 10.0

    half_w = np.tan(np.deg2rad(fov / 2.0)) * aspect_ratio * far
    ox, _, oz = constants.CAMERA_ORIGIN
    ax.plot([ox, ox - half_w], [oz, oz - far], 'k--', linewidth=1)
    ax.plot([ox, ox + half_w], [oz, oz - far], 'k--', linewidth=1)
    ax.plot(ox, oz, 'ro', markersize=6)
    ax.autoscale_view()


def create_visualization(output_path="output/scene_debug.png", renderer=None,
                         width=320, height=240, fov=constants.DEFAULT_FOV_DEGREES):
    """Save a two-panel debug figure: scene layout and visible-light counts."""
    renderer = renderer if renderer is not None else DebugRenderer()

    fig = plt.figure(figsize=(14, 6))
    ax1 = fig.add_subplot(1, 2, 1)  # Top Down
    ax2 = fig.add_subplot(1, 2, 2)  # Light counts

    plot_top_down(ax1, renderer.scene, fov=fov, aspect_ratio=width / height)

    counts = renderer.render_light_counts(width, height, fov)
    n_lights = len(renderer.scene.lights)
    ax2.set_title("Visible Lights per Pixel (-1 = background)")
    ax2.axis('off')
    im = ax2.imshow(counts, cmap='viridis', vmin=-1, vmax=max(n_lights, 1))
    fig.colorbar(im, ax=ax2, fraction=0.035)

    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    fig.savefig(output_path)
    plt.close(fig)
    return output_path


if __name__ == "__main__":
    print("Saving scene visualization to output/scene_debug.png...")
    create_visualization()
    print("Done.")
