from domain.models.quote import SourceDescriptor

# Declaration order is the iteration order of every aggregation run.
SOURCES: dict[str, list[SourceDescriptor]] = {
	'ARS': [
		SourceDescriptor(name='Ambito', identifier='https://www.ambito.com/contenidos/dolar.html'),
		SourceDescriptor(name='DolarHoy', identifier='https://www.dolarhoy.com'),
		SourceDescriptor(
			name='Cronista',
			identifier='https://www.cronista.com/MercadosOnline/moneda.html?id=ARSB',
		),
	],
	'BRL': [
		SourceDescriptor(
			name='Wise', identifier='https://wise.com/es/currency-converter/brl-to-usd-rate'
		),
		SourceDescriptor(name='Nubank', identifier='https://nubank.com.br/taxas-conversao/'),
		SourceDescriptor(name='Nomad Global', identifier='https://www.nomadglobal.com'),
	],
}
