import gradio as gr
import PIL.Image
from sphere_renders import constants
from .core import Renderer

# Keep the previous frame visible while a new one renders.
CSS = """
.gradio-container { background-color: #0b0f19 !important; color: #e5e7eb !important; }
#output_img { background-color: #0b0f19 !important; border-radius: 8px; overflow: hidden; border: none !important; }
#output_img img { object-fit: contain; image-rendering: pixelated; }

.generating, .pending {
    opacity: 1 !important;
    filter: none !important;
    transition: none !important;
}

.loading, .progress-view, .loader, .spinner {
    display: none !important;
    visibility: hidden !important;
}
"""

DEFAULT_VIEW = [constants.DEFAULT_FOV_DEGREES, constants.DEFAULT_WIDTH, True]


def render_frame(renderer, fov, resolution, use_shad):
    """Render one preview frame as a PIL image, keeping a 4:3 aspect ratio."""
    w = int(resolution)
    h = int(resolution * 0.75)
    image = renderer.render(width=w, height=h, fov=fov, use_shadows=use_shad)
    return PIL.Image.fromarray(image.to_rgb8())


def create_ui(renderer=None):

    renderer = renderer if renderer is not None else Renderer()

    def on_change(fov, resolution, use_shad):
        return render_frame(renderer, fov, resolution, use_shad)

    with gr.Blocks(title="Sphere Renderer") as demo:

        gr.Markdown("# Sphere Renderer: Preview")
        gr.Markdown("Lambertian spheres lit by point lights, with hard shadows.")

        with gr.Row():
            with gr.Column(scale=1):
                with gr.Group():
                    gr.Markdown("### 🎥 Camera Settings")
                    fov_slider = gr.Slider(minimum=5, maximum=120, value=constants.DEFAULT_FOV_DEGREES,
                                           label="Field of View (FOV)", info="Vertical, in degrees")
                    res_slider = gr.Slider(minimum=160, maximum=1280, value=constants.DEFAULT_WIDTH, step=160,
                                           label="Render Width", info="Lower for speed, higher for quality")
                    reset_btn = gr.Button("🔄 Reset Viewport", variant="secondary")

                with gr.Group():
                    gr.Markdown("### 💡 Lighting")
                    shad_toggle = gr.Checkbox(value=True, label="Shadows", info="Cast shadow rays to each light")

            with gr.Column(scale=2):
                output_img = gr.Image(label="Viewport", interactive=False, elem_id="output_img")

        inputs = [fov_slider, res_slider, shad_toggle]

        def reset_view():
            return list(DEFAULT_VIEW)

        reset_btn.click(fn=reset_view, outputs=inputs)

        # Auto-render on any change
        for input_comp in inputs:
            input_comp.change(fn=on_change, inputs=inputs, outputs=output_img,
                              trigger_mode="always_last", show_progress="hidden")

        # Initial render
        demo.load(fn=on_change, inputs=inputs, outputs=output_img, show_progress="hidden")

    return demo


if __name__ == "__main__":
    demo = create_ui()
    demo.launch(css=CSS)
