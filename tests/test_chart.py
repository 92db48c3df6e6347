"""
Unit tests for the PaceChart figure builder.
"""

from pace_charts import PaceChart, move_tooltip, restyle_path, write_html


def make_chart():
    return PaceChart(width=600, height=300, container_width=700, container_height=360)


class TestPaceChart:

    def test_pixel_axes(self):
        fig = make_chart().build()

        assert tuple(fig.layout.xaxis.range) == (0, 600)
        assert tuple(fig.layout.yaxis.range) == (300, 0)
        assert fig.layout.width == 700

    def test_add_path(self):
        fig = make_chart().add_path('US', 'M0,0L10,10', color='red', width=1.5).build()

        shape = fig.layout.shapes[0]
        assert shape.name == 'US'
        assert shape.path == 'M0,0L10,10'
        assert shape.line.width == 1.5

    def test_empty_path_is_skipped(self):
        fig = make_chart().add_path('US', '', color='red').build()

        assert len(fig.layout.shapes) == 0

    def test_restyle_path(self):
        fig = make_chart().add_path('US', 'M0,0L1,1', color='red').add_path('GB', 'M0,1L1,0', color='blue').build()

        restyle_path(fig, 'GB', '#74c476', 2)

        assert fig.layout.shapes[1].line.color == '#74c476'
        assert fig.layout.shapes[0].line.color == 'red'

    def test_move_tooltip(self):
        fig = make_chart().add_tooltip().build()

        move_tooltip(fig, 'France 1,234', 605, 40)

        annotation = fig.layout.annotations[0]
        assert annotation.text == 'France 1,234'
        assert annotation.x == 605
        assert annotation.visible is True

    def test_margins(self):
        fig = make_chart().set_margins(top=10, left=5, right=20, bottom=15).build()

        assert fig.layout.margin.t == 10
        assert fig.layout.margin.r == 20

    def test_hover_reaches_the_closest_point_anywhere(self):
        fig = make_chart().build()

        assert fig.layout.hoverdistance == -1
        assert fig.layout.hovermode == 'closest'


class TestWriteHtml:

    def test_page_includes_hover_script(self, tmp_path):
        fig = make_chart().add_path('US', 'M0,0L1,1', color='red').add_tooltip().build()
        path = tmp_path / 'chart.html'

        write_html(fig, str(path), include_plotlyjs='cdn')

        html = path.read_text(encoding='utf-8')
        assert "plotly_hover" in html
        assert "pointer-overlay" in html
        assert "{plot_id}" not in html
