# gui.elevator_ui.py
import os

import gradio as gr

from gui.elevator_state import ElevatorStateView
from request import Direction

STATUS_HEADERS = ["ID", "楼层", "方向", "状态", "目标楼层"]

CUSTOM_CSS = """
.stop-btn {
    font-size: 20px !important;
    height: 35px !important;
    min-width: 150px !important;
    max-width: 150px !important;
    padding: 2px 4px !important;
    margin: 4px !important;
}
.status-box {
    font-size: 20px;
    padding: 4px;
}
.log-box textarea {
    font-family: monospace !important;
    font-size: 12px !important;
}
"""


def create_ui(view: ElevatorStateView):
    config = view.system.config

    with gr.Blocks(title="电梯系统可视化", css=CUSTOM_CSS) as demo:
        gr.Markdown(f"# 🛗 多电梯调度系统（{config.floors} 层，{config.elevators} 部电梯）")

        # 停止按钮
        with gr.Row():
            stop_button = gr.Button("🟥 停止程序", elem_classes="stop-btn")

            def stop_program():
                view.system.event_log.emit("🚨 用户终止了程序运行。")
                view.shutdown()
                os._exit(0)

            stop_button.click(stop_program, None)

        with gr.Row():
            # 电梯状态表
            with gr.Column(scale=3):
                gr.Markdown("## 电梯状态")
                status_table = gr.Dataframe(
                    headers=STATUS_HEADERS,
                    value=view.status_rows(),
                    interactive=False,
                )
                stats = gr.Markdown(view.stats_text(), elem_classes="status-box")

            # 控制面板
            with gr.Column(scale=2):
                gr.Markdown("## 控制")
                with gr.Tab("楼梯间呼叫"):
                    call_floor = gr.Number(label="楼层", value=1, minimum=1, maximum=config.floors, precision=0)
                    call_direction = gr.Radio(
                        label="方向",
                        choices=[Direction.UP.value, Direction.DOWN.value],
                        value=Direction.UP.value,
                    )
                    call_button = gr.Button("呼叫电梯")
                    call_result = gr.Markdown()

                    def _call(floor, direction):
                        result = view.call(int(floor), Direction(direction))
                        return f"{int(floor)} 楼 {direction}：{result.value}"

                    call_button.click(_call, inputs=[call_floor, call_direction], outputs=call_result)

                with gr.Tab("电梯内"):
                    elevator_id = gr.Dropdown(
                        label="电梯",
                        choices=list(range(config.elevators)),
                        value=0,
                    )
                    press_floor = gr.Number(label="楼层", value=1, minimum=1, maximum=config.floors, precision=0)
                    press_button = gr.Button("按下楼层按钮")
                    press_result = gr.Markdown()

                    def _press(eid, floor):
                        result = view.press(int(eid), int(floor))
                        return f"电梯 {int(eid)} → {int(floor)} 楼：{result.value}"

                    press_button.click(_press, inputs=[elevator_id, press_floor], outputs=press_result)

                with gr.Tab("自动"):
                    gr.Markdown("随机产生楼梯间呼叫和电梯内请求")
                    random_button = gr.Button("开启")

                    def _toggle():
                        return "关闭" if view.toggle_random() else "开启"

                    random_button.click(_toggle, None, outputs=random_button)

        gr.Markdown("## 日志")
        log_box = gr.Textbox(lines=10, max_lines=10, interactive=False, show_label=False,
                             elem_classes="log-box")

        def update_status():
            return view.status_rows(), view.log_text(), view.stats_text()

        timer = gr.Timer(value=0.5, active=True, render=True)
        timer.tick(update_status, inputs=None, outputs=[status_table, log_box, stats])

    return demo
