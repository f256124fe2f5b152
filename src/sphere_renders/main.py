import argparse
import sys
import time
from sphere_renders import constants
from sphere_renders.core import Renderer
from sphere_renders.errors import ImageWriteError
from sphere_renders.ui import create_ui


def render_to_file(renderer, output, width, height, fov, use_shadows=True):
    """Render the scene and write it as a PPM file."""
    print(f"Rendering {width}x{height} (fov {fov:g} deg)...")
    t0 = time.time()
    renderer.save(output, width=width, height=height, fov=fov, use_shadows=use_shadows)
    print(f"  Complete in {time.time() - t0:.2f}s")
    print(f"Render complete: {output}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Sphere Shading Renderer CLI")
    parser.add_argument("--ui", action="store_true", help="Launch the interactive Gradio UI")
    parser.add_argument("-o", "--output", default=constants.DEFAULT_OUTPUT, help="Output PPM file path")
    parser.add_argument("--width", type=int, default=constants.DEFAULT_WIDTH, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=constants.DEFAULT_HEIGHT, help="Image height in pixels")
    parser.add_argument("--fov", type=float, default=constants.DEFAULT_FOV_DEGREES, help="Vertical field of view (degrees)")
    parser.add_argument("--no-shadows", action="store_true", help="Disable shadow rays")

    args = parser.parse_args(argv)

    if args.ui:
        print("Launching UI...")
        demo = create_ui()
        demo.launch()
        return 0

    if args.width <= 0 or args.height <= 0:
        parser.error("--width and --height must be positive")
    if not 0.0 < args.fov < 180.0:
        parser.error("--fov must be between 0 and 180 degrees")

    renderer = Renderer()
    try:
        render_to_file(renderer, args.output, args.width, args.height, args.fov,
                       use_shadows=not args.no_shadows)
    except ImageWriteError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def run_ui():
    """Entry point for sphere-render-ui command."""
    return main(["--ui"])


if __name__ == "__main__":
    sys.exit(main())
