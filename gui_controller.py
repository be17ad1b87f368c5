import time
import dearpygui.dearpygui as dpg

SLIDERS = ("input_force", "input_area", "output_area")


def _make_callbacks(shared):
    def slider_cb(sender, app_data, user_data):
        # main loop picks up f"set_{name}" and clears it
        try:
            shared[f"set_{user_data}"] = float(app_data)
        except (TypeError, ValueError):
            pass
    def realistic_cb(sender, app_data, user_data):
        shared['realistic_mode'] = bool(app_data)
    def release_cb():
        shared['release'] = True
    def reset_cb():
        shared['reset'] = True
    def exit_cb():
        shared['__exit__'] = True
    return slider_cb, realistic_cb, release_cb, reset_cb, exit_cb


def _sync_sliders(shared):
    """Follow values changed by pump / release / reset, except on a slider being dragged."""
    for name in SLIDERS:
        tag = f"{name}_slider"
        if dpg.is_item_active(tag):
            continue
        value = shared.get(name)
        if value is not None:
            dpg.set_value(tag, float(value))


def run_gui(shared):
    """
    Run DearPyGui in its own process. Writes requests into `shared` dict,
    reads the current press values back from it.
    """
    dpg.create_context()

    slider_cb, realistic_cb, release_cb, reset_cb, exit_cb = _make_callbacks(shared)
    ranges = shared.get('ranges', {})

    with dpg.window(label="Press Controls", tag="controls_window", width=380, height=380):
        dpg.add_text("Inputs")
        dpg.add_spacer()
        for name, label in (("input_force", "Input force F1 (N)"),
                            ("input_area", "Input area A1 (cm2)"),
                            ("output_area", "Output area A2 (cm2)")):
            lo, hi, _step = ranges.get(name, (0.0, 500.0, 1.0))
            dpg.add_text(label)
            dpg.add_slider_float(label=name.split('_')[0].title(), tag=f"{name}_slider",
                                 default_value=float(shared.get(name, lo)),
                                 min_value=float(lo), max_value=float(hi), format="%.0f",
                                 callback=slider_cb, user_data=name)
        dpg.add_checkbox(label="Realistic mode (slow)", tag="realistic_checkbox",
                         default_value=bool(shared.get('realistic_mode', False)), callback=realistic_cb)
        dpg.add_separator()
        dpg.add_text("Hold to pump")
        dpg.add_button(label="Pump", tag="pump_button", width=120)
        with dpg.group(horizontal=True):
            dpg.add_button(label="Release", callback=lambda s, a, u: release_cb())
            dpg.add_button(label="Reset", callback=lambda s, a, u: reset_cb())
            dpg.add_button(label="Exit GUI", callback=lambda s, a, u: exit_cb())
        dpg.add_spacer()
        dpg.add_text("Status:", tag="status_label")
        dpg.add_text("", tag="status_text")
        dpg.add_text("", tag="warning_text", color=(245, 158, 11))

    dpg.create_viewport(title='Press Controls', width=400, height=420)
    dpg.set_primary_window("controls_window", True)
    dpg.setup_dearpygui()
    dpg.show_viewport()

    try:
        while not shared.get('__exit__', False) and dpg.is_dearpygui_running():
            # press-and-hold: the button is "active" only while the mouse is down on it
            shared['pump_held'] = bool(dpg.is_item_active("pump_button"))

            _sync_sliders(shared)
            dpg.set_value("realistic_checkbox", bool(shared.get('realistic_mode', False)))
            dpg.set_value("status_text", shared.get('status', ''))
            dpg.set_value("warning_text", "A1 >= A2: no mechanical advantage" if shared.get('warning') else "")

            dpg.render_dearpygui_frame()
            time.sleep(0.01)
    finally:
        shared['pump_held'] = False
        dpg.destroy_context()
